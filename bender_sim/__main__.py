import sys

from bender_sim.cli import main

sys.exit(main())
