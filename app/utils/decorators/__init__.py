from app.utils.decorators.role_required import admin_required, owner_required, role_required

__all__ = ['admin_required', 'owner_required', 'role_required']
