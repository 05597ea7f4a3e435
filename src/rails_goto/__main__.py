from rails_goto.cli import main

raise SystemExit(main())
