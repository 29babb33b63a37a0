import sys

from portal_analytics.cli import main

sys.exit(main())
