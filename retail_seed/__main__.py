import sys

from retail_seed.main import main

sys.exit(main())
