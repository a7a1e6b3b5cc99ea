import sys

from assertify.cli import main

sys.exit(main())
