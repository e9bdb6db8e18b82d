import sys

from k8s_dev.installer import main

sys.exit(main())
