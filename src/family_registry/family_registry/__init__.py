"""Family Registry package.

This package is organized by feature modules (families, transfer, reports, ...)
with a thin Flask controller layer over service/repository layers. All state is
kept in an injected key-value storage owned by the container.
"""
