from proctop.app import main

raise SystemExit(main())
