"""
Package: history
Description: Webhook history windowing and display.

- paginator: Page setting, navigation and window over the event store
- projector: Row/detail projection and response normalization
- view: Command interface and rendered page for the UI
"""
