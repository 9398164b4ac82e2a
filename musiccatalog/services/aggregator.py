"""
Folder and Album Aggregation

Folds the per-file bitrate and genre of an album into one value each.
A plain album folder is scanned directly; a multi-disc album threads the
same accumulators through every disc folder, so disagreement between discs
produces the same sentinels as disagreement between files.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from ..core.consensus import BitrateConsensus, GenreConsensus
from ..core.exceptions import AudioDecodeError, NoAudioFramesError, TagReadError
from ..utils.filesystem import file_extension, list_files, list_subdirectories, normalize_extensions
from .audio_probe import AudioProbe, MutagenAudioProbe

PathLike = Union[str, Path]

MP3_EXTENSION = "MP3"


class AlbumAggregator:
    """
    Derives the album-level bitrate and genre

    The bitrate token of an MP3 file is the kbps of its first frame; any
    other allowed file contributes its upper-cased extension, so folders
    mixing formats report ``?``.
    """

    def __init__(self, extensions: Iterable[str], probe: Optional[AudioProbe] = None):
        self.extensions = normalize_extensions(extensions)
        self.probe = probe or MutagenAudioProbe()
        self.logger = logging.getLogger(__name__)
        self.stats = {
            'folders': 0,
            'files': 0,
            'empty_files': 0,
            'decode_errors': 0,
            'tag_errors': 0,
        }

    def aggregate_album(self, album: PathLike) -> Tuple[str, str]:
        """
        Aggregate one album folder

        Args:
            album: Album folder, either holding the tracks or one folder per disc

        Returns:
            Tuple of (bitrate, genre)
        """
        discs = list_subdirectories(Path(album))
        if not discs:
            return self.aggregate_folder(album)

        bitrate, genre = "", ""
        for disc in discs:
            bitrate, genre = self.aggregate_folder(disc, bitrate, genre)
        return bitrate, genre

    def aggregate_folder(self, folder: PathLike, bitrate_acc: str = "",
                         genre_acc: str = "") -> Tuple[str, str]:
        """
        Fold the files of one folder into the given accumulators

        Scanning stops at the first file that introduces a conflict, so a
        bitrate conflict also leaves the genres of the remaining files unread.

        Args:
            folder: Folder holding audio files, not searched recursively
            bitrate_acc: Bitrate accumulated so far
            genre_acc: Genre accumulated so far

        Returns:
            Tuple of (bitrate, genre)
        """
        self.stats['folders'] += 1
        bitrate = BitrateConsensus(bitrate_acc)
        genre = GenreConsensus(genre_acc)

        for filepath in list_files(Path(folder)):
            extension = file_extension(filepath)
            if extension not in self.extensions:
                continue
            self.stats['files'] += 1

            if extension == MP3_EXTENSION:
                token = self._read_bitrate(filepath)
            else:
                token = extension

            if token is not None and bitrate.offer(token):
                self.logger.debug(f"Bitrate conflict in {folder}: {bitrate.value} at {filepath.name}")
                break

            if genre.offer_genre(self._read_genre(filepath)):
                self.logger.debug(f"Genre conflict in {folder} at {filepath.name}")
                break

        return bitrate.value, genre.value

    def _read_bitrate(self, filepath: Path) -> Optional[str]:
        try:
            return self.probe.probe_bitrate(filepath)
        except NoAudioFramesError:
            self.stats['empty_files'] += 1
            self.logger.warning(f"File '{filepath}' did not contain any frames!")
        except AudioDecodeError as e:
            self.stats['decode_errors'] += 1
            self.logger.error(f"Cannot read file '{filepath}'")
            self.logger.error(f"Error decoding: {e}")
        return None

    def _read_genre(self, filepath: Path) -> Optional[str]:
        try:
            return self.probe.probe_genre(filepath)
        except TagReadError as e:
            self.stats['tag_errors'] += 1
            self.logger.error(f"Cannot read tag in file '{filepath}'")
            self.logger.error(str(e))
        return None

    def get_stats(self) -> Dict[str, int]:
        return self.stats.copy()


def aggregate_folder(extensions: Iterable[str], folder: PathLike, bitrate_acc: str = "",
                     genre_acc: str = "", probe: Optional[AudioProbe] = None) -> Tuple[str, str]:
    """Convenience wrapper around :meth:`AlbumAggregator.aggregate_folder`"""
    return AlbumAggregator(extensions, probe).aggregate_folder(folder, bitrate_acc, genre_acc)


def aggregate_album(extensions: Iterable[str], album: PathLike,
                    probe: Optional[AudioProbe] = None) -> Tuple[str, str]:
    """Convenience wrapper around :meth:`AlbumAggregator.aggregate_album`"""
    return AlbumAggregator(extensions, probe).aggregate_album(album)


__all__ = ['AlbumAggregator', 'aggregate_folder', 'aggregate_album']
