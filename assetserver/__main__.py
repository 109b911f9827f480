import sys

from assetserver.cli import main

sys.exit(main())
