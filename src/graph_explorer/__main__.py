import sys

from graph_explorer.cli import main

sys.exit(main())
