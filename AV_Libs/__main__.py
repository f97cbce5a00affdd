import sys

from AV_Libs.cli import main

sys.exit(main())
