"""tunnelprep: create a Cloudflare Tunnel and stage its credentials."""

__version__ = "1.0.0"

_LAZY_IMPORTS = {
    "run_wizard": "tunnelprep.setup_wizard",
    "Settings": "tunnelprep.config",
    "Cloudflared": "tunnelprep.cloudflared",
    "extract_tunnel_id": "tunnelprep.parser",
    "resolve_tunnel": "tunnelprep.resolver",
    "TunnelResolution": "tunnelprep.resolver",
    "materialize_credentials": "tunnelprep.credentials",
    "ensure_tools": "tunnelprep.installer",
    "ensure_login": "tunnelprep.auth",
}


def __getattr__(name: str):
    if name in _LAZY_IMPORTS:
        import importlib

        module = importlib.import_module(_LAZY_IMPORTS[name])
        return getattr(module, name)
    raise AttributeError(f"module 'tunnelprep' has no attribute {name}")


__all__ = [*_LAZY_IMPORTS]
