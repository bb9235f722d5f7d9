import sys

from autoenv.scripts.autoenv import main

sys.exit(main())
