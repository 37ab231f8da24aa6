"""Entry point for running the API as a module: python -m parity"""

# Load .env file before importing anything else
from dotenv import load_dotenv
load_dotenv()

from parity.main import main

if __name__ == "__main__":
    main()
