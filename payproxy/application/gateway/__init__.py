"""
Application layer for the gateway bounded context.

The forwarder validates inputs, resolves URLs and maps transport
results to forwarding outcomes. No framework or infrastructure imports.
"""
