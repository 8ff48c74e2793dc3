import sys

from gl_tagger.cli import main

sys.exit(main())
