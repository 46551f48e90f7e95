from app.schemas.goal import Area

# Display order of areas on the dashboard
AREAS = [
    {"id": Area.wealth, "display_name": "Wealth", "icon": "💰"},
    {"id": Area.health, "display_name": "Health", "icon": "🏥"},
    {"id": Area.relationships, "display_name": "Relationships", "icon": "❤️"},
    {"id": Area.soul, "display_name": "Soul", "icon": "🧘"},
]

# Goal columns holding calendar dates
DATE_FIELDS = ("start_date", "expected_completion_date", "actual_completion_date")

# Columns the access layer never lets an update overwrite
IMMUTABLE_FIELDS = ("id", "user_id", "created_at")

# Columns that may be cleared with None
NULLABLE_FIELDS = ("actual_completion_date", "expected_amount", "actual_amount", "image_url")
