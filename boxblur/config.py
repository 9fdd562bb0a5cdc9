import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

LOG_LEVEL = os.getenv("BOXBLUR_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv(
    "BOXBLUR_LOG_FORMAT", "%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s"
)
LOG_DATEFMT = os.getenv("BOXBLUR_LOG_DATEFMT", "%H:%M:%S")

# Largest buffer (width * height) the arena will allocate; 0 disables the ceiling.
MAX_PIXELS = int(os.getenv("BOXBLUR_MAX_PIXELS", "0"))
