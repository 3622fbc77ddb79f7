import sys

from gtranslate.cli_main import main

sys.exit(main())
