import sys

from ewp.cli import main

sys.exit(main())
