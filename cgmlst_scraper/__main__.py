import sys

from cgmlst_scraper.cli import main

sys.exit(main())
