import sys

from phishpane.cli import main

sys.exit(main())
