from mrrd.create_dataset import main

raise SystemExit(main())
