"""Vault Relay Bot Application Package.

A Telegram webhook relay that accepts bot updates, checks the sender against
an allow-list and forwards supported media (video, audio, photo, video notes
and voice messages) to a fixed channel. The original message gets a reaction
that tells the sender whether the forward went through.

The application follows a modular architecture with separate concerns for:
- Configuration loading and the request-time configuration gate
- Update classification, authorization and command handling
- Forwarding with reaction feedback
- Localized bot-facing text
"""
