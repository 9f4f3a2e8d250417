"""Allow ``python -m setup_pro``."""

from setup_pro.pipeline import main

main()
