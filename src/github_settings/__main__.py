import sys

from github_settings.cli import main

sys.exit(main())
