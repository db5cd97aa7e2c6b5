"""
Package: gateway_dashboard
Description: Webhook history and real-time sync layer of a messaging gateway dashboard.

Records webhook delivery outcomes pushed by the gateway in a bounded,
persisted, paginated history and keeps the session view in step with
the gateway's push-event stream.
"""

__version__ = "0.1.0"
