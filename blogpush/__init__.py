"""Push-notification subscription lifecycle and dispatch for the blogging platform."""
