"""Telegram relay pipeline package.

Contains the webhook request pipeline: update classification, access checks,
command dispatch, forwarding with reactions, user notifications and the
localized text lookup shared by all of them.
"""
