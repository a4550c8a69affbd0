from svoxbatch.cli import main

raise SystemExit(main())
