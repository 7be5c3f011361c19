import sys

from ai_pr_reviewer.cli import main

sys.exit(main())
