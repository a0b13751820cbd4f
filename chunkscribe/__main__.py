import sys
from chunkscribe.cli import main

sys.exit(main())
