"""Minimal note-taking from the command line, intended for quick thoughts and drafts.

If you installed via ``pip``, run ``newt -h`` to get help.

Configuration is resolved by :func:`newt.conf.resolve_config`; see :mod:`newt.conf` for the file format.
"""
