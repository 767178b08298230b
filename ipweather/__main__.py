import sys

from ipweather.cli import main

sys.exit(main())
