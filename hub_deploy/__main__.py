"""Allow ``python -m hub_deploy``"""

from .cli.main import main

if __name__ == "__main__":
    main()
