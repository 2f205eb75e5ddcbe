from detect_changed_files.cli import main

raise SystemExit(main())
