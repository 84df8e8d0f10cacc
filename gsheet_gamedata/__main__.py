from gsheet_gamedata.cli import main

raise SystemExit(main())
