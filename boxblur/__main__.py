import sys

from .cli.batch_process import main

sys.exit(main())
