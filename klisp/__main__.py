from klisp.repl import main

raise SystemExit(main())
