"""
Use Cases

Organized into domain folders:
- auth/: Registration and session context
- roles/: Role, account-role and route-grant administration
- audit/: Audit logs

Import from subdirectories.
"""
