from treescribe.cli import main

raise SystemExit(main())
