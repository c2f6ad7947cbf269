import sys

from sqlconst.cli import main

sys.exit(main())
