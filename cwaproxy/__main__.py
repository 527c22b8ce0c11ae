import sys

from cwaproxy.cli import main

sys.exit(main())
