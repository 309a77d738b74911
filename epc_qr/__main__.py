import sys

from epc_qr.cli import main

sys.exit(main())
