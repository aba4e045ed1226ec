"""
Use Cases

Organized into domain folders:
- invite_codes/: Issuing, listing and redeeming care team invite codes
- profiles/: Profile lookup

Import from subdirectories.
"""
