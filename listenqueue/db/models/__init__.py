from listenqueue.db.models.user import User
from listenqueue.db.models.playlist import Playlist
from listenqueue.db.models.media import GlobalMedia, Media
from listenqueue.db.models.history import History

__all__ = ["User", "Playlist", "GlobalMedia", "Media", "History"]
