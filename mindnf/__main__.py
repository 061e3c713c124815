import sys

from mindnf.main import main

sys.exit(main())
