import sys

from wish.cli import main

sys.exit(main())
