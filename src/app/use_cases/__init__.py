"""
Use Cases

Organized into domain folders:
- membership/: Join/follow requests and member management
- roles/: Community moderator and admin assignment
- communities/: Community lifecycle and audit trail
- invites/: Community invites
- orgs/: Organization roles
- users/: Caller permissions and app roles

Import from subdirectories.
"""
