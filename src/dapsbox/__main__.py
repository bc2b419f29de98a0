"""
Allows running as: python -m dapsbox <args>
"""
from dapsbox.CLI.main import main

if __name__ == "__main__":
    main()
