import sys

from priosim.cli import main

sys.exit(main())
