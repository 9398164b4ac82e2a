"""
Audio Probe Service

Reads the two facts the catalog needs from a single audio file:
the bitrate of its first MPEG frame and its embedded genre tag.
"""

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

import mutagen
from mutagen import MutagenError
from mutagen.mp3 import MP3, HeaderNotFoundError, MPEGFrame

from ..core.exceptions import AudioDecodeError, NoAudioFramesError, TagReadError

PathLike = Union[str, Path]


class AudioProbe(ABC):
    """Interface of the per-file probe used by the aggregators"""

    @abstractmethod
    def probe_bitrate(self, filepath: PathLike) -> str:
        """
        Bitrate of the first audio frame in kbps, as a decimal string

        Raises:
            NoAudioFramesError: The file has no audio frame at all
            AudioDecodeError: The file cannot be decoded
        """

    @abstractmethod
    def probe_genre(self, filepath: PathLike) -> Optional[str]:
        """
        Embedded genre, None when the file carries no genre

        Raises:
            TagReadError: The tag cannot be read
        """


class MutagenAudioProbe(AudioProbe):
    """Audio probe backed by mutagen"""

    GENRE_KEYS = ('genre', 'GENRE', '\xa9gen')
    GENRE_SEPARATOR = '/'

    def probe_bitrate(self, filepath: PathLike) -> str:
        try:
            audio = MP3(str(filepath))
        except HeaderNotFoundError as e:
            raise NoAudioFramesError(
                "File did not contain any frames",
                details=str(e),
                filepath=str(filepath)
            )
        except (MutagenError, OSError) as e:
            raise AudioDecodeError(
                "Cannot decode file",
                details=str(e),
                filepath=str(filepath)
            )

        return str(self._first_frame_bitrate(filepath, audio.info.frame_offset) // 1000)

    def _first_frame_bitrate(self, filepath: PathLike, frame_offset: int) -> int:
        # info.bitrate is the Xing/VBRI average when such a header exists,
        # so the header of the first frame is parsed again on its own
        try:
            with open(filepath, "rb") as f:
                f.seek(frame_offset)
                header = f.read(4)
            return MPEGFrame(io.BytesIO(header)).bitrate
        except (HeaderNotFoundError, OSError) as e:
            raise AudioDecodeError(
                "No bitrate in MPEG header",
                details=str(e),
                filepath=str(filepath)
            )

    def probe_genre(self, filepath: PathLike) -> Optional[str]:
        try:
            audio = mutagen.File(str(filepath), easy=True)
        except (MutagenError, OSError) as e:
            raise TagReadError(
                "Cannot read tag",
                details=str(e),
                filepath=str(filepath)
            )

        if audio is None:
            raise TagReadError("Unsupported audio format", filepath=str(filepath))
        if not audio.tags:
            return None

        genres = self._genre_values(audio.tags)
        if not genres:
            return None
        return self.GENRE_SEPARATOR.join(genres)

    def _genre_values(self, tags) -> List[str]:
        values = None
        for key in self.GENRE_KEYS:
            try:
                values = tags.get(key)
            except (KeyError, ValueError):
                values = None
            if values:
                break

        # Raw ID3 tags (WAVE, AIFF) are not mapped to easy keys
        if not values and hasattr(tags, 'getall'):
            frames = tags.getall('TCON')
            values = [text for frame in frames for text in frame.text]

        if not values:
            return []
        if isinstance(values, str):
            values = [values]

        genres = []
        for value in values:
            # NUL separates multiple values in ID3v2.4 frames
            for part in str(value).split('\0'):
                part = part.strip()
                if part:
                    genres.append(part)
        return genres


__all__ = ['AudioProbe', 'MutagenAudioProbe']
