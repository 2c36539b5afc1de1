"""Entertainment hub: media library and playlists."""
import copy
import logging
from typing import Optional

from palette_navigator.errors import DecodeError, Status, WriteError
from palette_navigator.models import MediaItem, MediaType, Playlist
from palette_navigator.storage import (
    MEDIA_ITEMS_KEY, PLAYLISTS_KEY, load_collection, save_collection,
)
from palette_navigator.store import CollectionStore

logger = logging.getLogger(__name__)


class MediaStore(CollectionStore):
    """Media items plus playlists, persisted under two separate keys.

    Playlists hold snapshot copies of media items. Editing an item does not
    touch the copies already in playlists; deleting an item removes it from
    every playlist.
    """

    key = MEDIA_ITEMS_KEY
    record_type = MediaItem
    text_fields = ("title", "description", "category")
    filter_fields = {"selected_media_type": "type"}
    group_field = "type"

    selected_media_type: Optional[MediaType]

    def __init__(self, db_path: str):
        super().__init__(db_path)
        self.playlists: list[Playlist] = []

    @property
    def media_items(self) -> list[MediaItem]:
        return self.records

    @property
    def filtered_media_items(self) -> list[MediaItem]:
        return self.filtered

    @property
    def media_items_by_type(self) -> dict[MediaType, list[MediaItem]]:
        return self.grouped

    @property
    def favorite_items(self) -> list[MediaItem]:
        return [item for item in self.records if item.is_favorite]

    # -- persistence --

    def load(self) -> Status:
        status = super().load()
        try:
            self.playlists = load_collection(self.db_path, PLAYLISTS_KEY, Playlist.from_dict) or []
        except DecodeError as e:
            logger.warning("Discarding unreadable playlists: %s", e)
            self.playlists = []
            status = Status.DECODE_ERROR
        return status

    def save(self) -> Status:
        status = super().save()
        try:
            save_collection(self.db_path, PLAYLISTS_KEY, self.playlists)
        except WriteError as e:
            logger.error("Could not persist playlists: %s", e)
            status = Status.WRITE_ERROR
        return status

    def bootstrap(self, seed, seed_playlists=None) -> Status:
        """Load; on an empty library install the sample items and playlists."""
        status = self.load()
        if not self.records:
            self.records = list(seed())
            if seed_playlists is not None:
                self.playlists = list(seed_playlists())
            logger.info("Seeded %d media items and %d playlists",
                        len(self.records), len(self.playlists))
            self.save()
        return status

    # -- media items --

    def add_media_item(self, item: MediaItem) -> Status:
        return self.add(item)

    def update_media_item(self, item: MediaItem) -> Status:
        return self.update(item)

    def delete_media_item(self, item: MediaItem) -> Status:
        return self.delete(item)

    def _after_delete(self, record_id: str) -> None:
        for playlist in self.playlists:
            playlist.items = [i for i in playlist.items if i.id != record_id]

    def toggle_favorite(self, item: MediaItem) -> Status:
        return self.toggle(item, "is_favorite")

    # -- playlists --

    def find_playlist(self, playlist_id: str) -> Optional[Playlist]:
        return next((p for p in self.playlists if p.id == playlist_id), None)

    def create_playlist(self, name: str, description: str, color_theme: str) -> tuple[Status, Playlist]:
        """Append a new empty playlist. The playlist is kept even when the write fails."""
        playlist = Playlist(name=name, description=description, color_theme=color_theme)
        with self._lock:
            self.playlists.append(playlist)
            return self._commit(), playlist

    def add_to_playlist(self, item: MediaItem, playlist_id: str) -> Status:
        with self._lock:
            playlist = self.find_playlist(playlist_id)
            if playlist is None:
                return Status.NOT_FOUND
            if playlist.contains(item.id):
                return Status.OK
            playlist.items.append(copy.deepcopy(item))
            return self._commit()

    def remove_from_playlist(self, item: MediaItem, playlist_id: str) -> Status:
        with self._lock:
            playlist = self.find_playlist(playlist_id)
            if playlist is None:
                return Status.NOT_FOUND
            playlist.items = [i for i in playlist.items if i.id != item.id]
            return self._commit()

    def delete_playlist(self, playlist: Playlist) -> Status:
        with self._lock:
            if self.find_playlist(playlist.id) is None:
                return Status.NOT_FOUND
            self.playlists = [p for p in self.playlists if p.id != playlist.id]
            return self._commit()
