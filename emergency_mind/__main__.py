import sys

from emergency_mind.cli import main

sys.exit(main())
