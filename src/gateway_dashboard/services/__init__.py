"""
Package: services
Description: Concrete collaborators of the sync layer.

- session_directory: HTTP session list reload (coarse refresh)
- statistics: Webhook success/failure counters
"""
