"""Allow ``python -m treepass``."""

from treepass.main import main

raise SystemExit(main())
