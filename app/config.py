from dotenv import load_dotenv
import os

load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

GOALS_TABLE = os.getenv("GOALS_TABLE", "goals")
GOAL_IMAGES_BUCKET = os.getenv("GOAL_IMAGES_BUCKET", "goal-images")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
