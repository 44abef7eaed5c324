from supabase import Client
from app.modules.users.schemas import User
from typing import Optional
from datetime import datetime, timezone


class UserService:
    """Data access for the users table"""

    def __init__(self, supabase: Client, table: str = "users"):
        self.supabase = supabase
        self.table = table

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        result = self.supabase.table(self.table)\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()

        if not result.data:
            return None
        return User(**result.data[0])

    def get_user_by_email(self, email: str) -> Optional[User]:
        result = self.supabase.table(self.table)\
            .select("*")\
            .eq("email", email)\
            .limit(1)\
            .execute()

        if not result.data:
            return None
        return User(**result.data[0])

    def create_user(self, name: str, email: str, password_hash: str) -> Optional[User]:
        """Insert a user; the store assigns the id. Returns None if nothing was written."""
        result = self.supabase.table(self.table).insert({
            "name": name,
            "email": email,
            "password": password_hash,
        }).execute()

        if not result.data:
            return None
        return User(**result.data[0])

    def update_profile_picture(self, user_id: str, url: str) -> Optional[User]:
        result = self.supabase.table(self.table)\
            .update({
                "profile_picture": url,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            })\
            .eq("id", user_id)\
            .execute()

        if not result.data:
            return None
        return User(**result.data[0])
