import sys
from newt.cli import main

sys.exit(main())
