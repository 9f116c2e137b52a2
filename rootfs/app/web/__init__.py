from web.server import AppContext, WebServer

__all__ = ["AppContext", "WebServer"]
