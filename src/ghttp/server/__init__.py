"""Request pipeline internals: dispatcher, ASGI sender, server runner."""
