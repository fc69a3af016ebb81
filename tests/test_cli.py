import logging
import os
from freezegun import freeze_time
import pytest
from newt import cli


@pytest.fixture
def call(fs, mocker):
    fs.create_dir('/notes')
    mocker.patch.dict(os.environ, {'HOME': '/home/me'}, clear=True)
    return mocker.patch('subprocess.call', return_value=0)


def test_new_with_name(call):
    assert cli.main(['-d', '/notes', '-e', 'vim -n', 'new', 'todo.md']) == 0
    call.assert_called_once_with(['vim', '-n', '/notes/todo.md'], cwd='/notes')


@freeze_time('2012-05-02T03:04:05Z')
def test_new_is_default(call, fs):
    fs.create_file('/notes/2012-05-02_0.md')
    assert cli.main(['-d', '/notes', '-e', 'vim']) == 0
    call.assert_called_once_with(['vim', '/notes/2012-05-02_1.md'], cwd='/notes')


def test_config_file_from_environment(call, fs):
    os.environ['NEWT_CONFIG'] = '/cfg/newtrc'
    os.environ['NOTES'] = '/notes'
    fs.create_file('/cfg/newtrc', contents='notes_dir $NOTES\neditor "nano -w"  # my editor\n')
    assert cli.main(['new', 'a.md']) == 0
    call.assert_called_once_with(['nano', '-w', '/notes/a.md'], cwd='/notes')


def test_config_file_from_home(call, fs):
    fs.create_file('/home/me/.newtrc', contents='notes_dir ~/stuff\neditor "\'/opt/my editor\'"\n')
    fs.create_dir('/home/me/stuff')
    assert cli.main(['new', 'a.md']) == 0
    call.assert_called_once_with(['/opt/my editor', '/home/me/stuff/a.md'], cwd='/home/me/stuff')


def test_overrides_beat_config_file(call, fs):
    fs.create_file('/cfg', contents='notes_dir /elsewhere\neditor nano\n')
    assert cli.main(['-f', '/cfg', '-d', '/notes', 'new', 'a.md']) == 0
    call.assert_called_once_with(['nano', '/notes/a.md'], cwd='/notes')


def test_editor_status_warning(call, capsys):
    call.return_value = 2
    assert cli.main(['-d', '/notes', '-e', 'vim', 'new', 'a.md']) == 2
    out, err = capsys.readouterr()
    assert err == 'Warning: editor process returned with status 2\n'


def test_list(call, fs, capsys, mocker):
    mocker.patch('newt.notes._created', return_value=None)
    fs.create_file('/notes/a.md', contents='\nHello there\nmore')
    fs.create_file('/notes/b.md', contents='')
    assert cli.main(['-d', '/notes', 'list']) == 0
    out, err = capsys.readouterr()
    lines = out.splitlines()
    assert '| # | Name | First line  |' in lines
    assert '| 1 | a.md | Hello there |' in lines
    assert '| 2 | b.md |             |' in lines
    call.assert_not_called()


def test_list_width(call, fs, capsys):
    fs.create_file('/notes/a.md', contents='0123456789')
    assert cli.main(['-d', '/notes', 'list', '-w', '8']) == 0
    out, err = capsys.readouterr()
    assert '| 1 | a.md | 01234...   |' in out.splitlines()


def test_view(call, fs, mocker):
    mocker.patch('newt.notes._created', return_value=None)
    fs.create_file('/notes/a.md')
    fs.create_file('/notes/b.md')
    assert cli.main(['-d', '/notes', '-p', 'less -R', 'view', '2']) == 0
    call.assert_called_once_with(['less', '-R', '/notes/b.md'], cwd='/notes')


def test_edit(call, fs, mocker):
    fs.create_file('/notes/a.md')
    os.environ['EDITOR'] = 'ed'
    mocker.patch('shutil.which', side_effect=lambda name, path=None: '/usr/bin/ed' if name == 'ed' else None)
    assert cli.main(['-d', '/notes', 'edit', '1']) == 0
    call.assert_called_once_with(['ed', '/notes/a.md'], cwd='/notes')


def test_no_such_note(call, capsys):
    assert cli.main(['-d', '/notes', '-e', 'vim', 'edit', '1']) == 1
    out, err = capsys.readouterr()
    assert err == 'No note with index 1 (there are 0)\n'
    call.assert_not_called()


def test_config_error(call, fs, capsys):
    fs.create_file('/home/me/.newtrc', contents='notes_dir /notes\n\nbogus value\n')
    assert cli.main(['-e', 'vim', 'new', 'a.md']) == 1
    out, err = capsys.readouterr()
    assert err == "/home/me/.newtrc: line 3: unrecognized key 'bogus'\n"
    call.assert_not_called()


def test_missing_explicit_config_file(call, capsys):
    assert cli.main(['-f', '/nope', '-d', '/notes', '-e', 'vim']) == 1
    out, err = capsys.readouterr()
    assert err.startswith('Cannot read configuration file /nope')


def test_no_notes_dir(call, capsys):
    assert cli.main(['-e', 'vim', 'list']) == 1
    out, err = capsys.readouterr()
    assert err == 'No notes directory found\n'


def test_no_editor(call, capsys):
    os.environ['PATH'] = '/nothing/here'
    assert cli.main(['-d', '/notes', 'new', 'a.md']) == 1
    out, err = capsys.readouterr()
    assert err == 'No editor found\n'
    call.assert_not_called()


def test_verbose(call, caplog):
    caplog.set_level(logging.DEBUG, logger='newt')
    assert cli.main(['-v', '-d', '/notes', '-e', 'vim', 'new', 'a.md']) == 0
    assert 'No configuration file found, using default configuration' in caplog.messages
    assert 'Using notes directory /notes' in caplog.messages
    assert 'Using editor vim' in caplog.messages


def test_quiet_by_default(call, caplog):
    caplog.set_level(logging.DEBUG, logger='newt')
    assert cli.main(['-d', '/notes', '-e', 'vim', 'new', 'a.md']) == 0
    assert caplog.messages == []


def test_missing_notes_dir(call, capsys):
    for command in [['list'], ['view', '1'], ['edit', '1']]:
        assert cli.main(['-d', '/missing', '-e', 'vim', '-p', 'less'] + command) == 1
        out, err = capsys.readouterr()
        assert err.startswith('Cannot read /missing: ')
    call.assert_not_called()


def test_list_width_too_small(call, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(['-d', '/notes', 'list', '-w', '1'])
    assert excinfo.value.code == 2
    out, err = capsys.readouterr()
    assert 'must be at least 4, not 1' in err
