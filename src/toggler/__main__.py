import sys

from toggler.cli import main

sys.exit(main())
