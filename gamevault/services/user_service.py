# gamevault/services/user_service.py
import logging
from typing import Iterable, Optional
from urllib.parse import quote

from ..database import Store
from ..errors import PermissionDenied, UserNotFound
from ..models.user import User

AVATAR_URL = "https://ui-avatars.com/api/?name={name}&background=6366f1&color=fff"


class UserService:
    def __init__(self, store: Store, admin_ids: Iterable[int] = ()):
        self.store = store
        self.admin_ids = {str(id_) for id_ in admin_ids}
        self.logger = logging.getLogger(__name__)

    async def register_user(self, user_id, username: Optional[str] = None,
                            first_name: Optional[str] = None,
                            photo_url: Optional[str] = None) -> User:
        """Create the user on first contact or refresh the profile fields"""
        user_id = str(user_id)
        name = username or first_name or "User"
        avatar_url = photo_url or AVATAR_URL.format(name=quote(first_name or name))

        async with self.store.transaction() as tx:
            try:
                await tx.users.get(user_id, for_update=True)
            except UserNotFound:
                user = await tx.users.insert({
                    "id": user_id,
                    "username": name,
                    "avatar_url": avatar_url,
                    "is_admin": user_id in self.admin_ids,
                })
                self.logger.info(f"Registered user {user_id} ({name})")
                return user

            changes = {"username": name, "avatar_url": avatar_url}
            # configured admins are promoted, never demoted
            if user_id in self.admin_ids:
                changes["is_admin"] = True
            return await tx.users.update(user_id, changes)

    async def get_user(self, user_id) -> User:
        return await self.store.users.get(str(user_id))

    async def is_admin(self, user_id) -> bool:
        try:
            user = await self.get_user(user_id)
        except UserNotFound:
            return False
        return user.is_admin

    async def set_admin(self, acting_user_id, target_user_id, is_admin: bool) -> User:
        """Grant or revoke the admin flag; only admins may do this"""
        if not await self.is_admin(acting_user_id):
            raise PermissionDenied(str(acting_user_id), "change admin rights")
        user = await self.store.users.update(str(target_user_id), {"is_admin": is_admin})
        self.logger.info(f"Admin flag of {target_user_id} set to {is_admin} by {acting_user_id}")
        return user
