import os
from dotenv import load_dotenv

# Load env vars
load_dotenv()

AWS_REGION = os.getenv("AWS_DEFAULT_REGION", "us-east-1").strip()
OUTPUT_DIR = os.getenv("ECS_REGCREDS_OUTPUT_DIR", ".").strip()
