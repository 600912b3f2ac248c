import sys

from msgcheck.cli.main import main

sys.exit(main())
