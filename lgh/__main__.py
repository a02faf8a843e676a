import sys

from lgh.cli.main import main

sys.exit(main())
