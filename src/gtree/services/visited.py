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

from typing import Set

from ..domain.models import Identity


class VisitedSet:
    """
    Identities of directories that have been entered (or recorded as the root).

    Entries are never removed during a run; the set is discarded with the
    engine's run state once traversal completes.
    """

    def __init__(self) -> None:
        self._seen: Set[Identity] = set()

    def insert_if_absent(self, identity: Identity) -> bool:
        """Record `identity`. Returns True on first insertion, False if already present."""
        if identity in self._seen:
            return False
        self._seen.add(identity)
        return True

    def contains(self, identity: Identity) -> bool:
        return identity in self._seen

    def __contains__(self, identity: object) -> bool:
        return identity in self._seen

    def __len__(self) -> int:
        return len(self._seen)
