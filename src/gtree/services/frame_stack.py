# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
from typing import List

from ..domain.errors import TraversalError
from ..domain.models import DirFrame

logger = logging.getLogger(__name__)


class FrameStack:
    """
    Bounded LIFO of open DirFrames.

    Frames leave the stack only through `pop()` or `unwind()`, and both release
    the frame's directory handle, so each handle is closed exactly once.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("FrameStack capacity must be positive")
        self._capacity = int(capacity)
        self._frames: List[DirFrame] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, frame: DirFrame) -> None:
        if len(self._frames) >= self._capacity:
            frame.release()
            raise TraversalError(
                f"frame stack full ({self._capacity}) while entering {frame.path}"
            )
        self._frames.append(frame)

    def peek(self) -> DirFrame:
        if not self._frames:
            raise IndexError("peek on empty FrameStack")
        return self._frames[-1]

    def pop(self) -> DirFrame:
        frame = self._frames.pop()
        frame.release()
        return frame

    def unwind(self) -> int:
        """Pop and release every remaining frame. Returns how many were released."""
        count = 0
        while self._frames:
            self.pop()
            count += 1
        if count:
            logger.debug("FrameStack.unwind released %d frame(s)", count)
        return count

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)
