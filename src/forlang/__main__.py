import sys

from forlang.runner import main

sys.exit(main())
