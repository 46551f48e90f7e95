from pydantic import BaseModel
from typing import Optional

# --- Current user (auth.users) ---
class CurrentUser(BaseModel):
    id: str  # auth.users.id
    email: Optional[str] = None
