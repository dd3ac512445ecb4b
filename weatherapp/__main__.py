from weatherapp.cli import main

raise SystemExit(main())
