import sys

from wiki_path.cli import main

sys.exit(main())
