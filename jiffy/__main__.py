import sys
from jiffy.main import main

sys.exit(main())
