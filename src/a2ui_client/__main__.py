import sys

from a2ui_client.cli import main

sys.exit(main())
