"""
Package: sync
Description: Real-time synchronization with the gateway push stream.

- consumer: Push-event classification and routing policy
- transport: Socket.IO client lifecycle
- collaborators: Interfaces the consumer depends on
"""
