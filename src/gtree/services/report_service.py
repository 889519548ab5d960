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

from __future__ import annotations

from typing import List

from ..domain.models import ActivityReport

_UNITS = ("B", "K", "M", "G", "T")


def human_size(n: int) -> str:
    """
    Scale a byte count for display: 100B, 4.5K, 2.1M, ...

    Plain bytes carry no decimals; every larger unit carries one.
    """
    size = float(n)
    unit = 0
    while size >= 1024.0 and unit < len(_UNITS) - 1:
        size /= 1024.0
        unit += 1
    if unit == 0:
        return f"{size:.0f}{_UNITS[0]}"
    return f"{size:.1f}{_UNITS[unit]}"


class ReportService:
    """
    Renders the summary block printed after the tree.

    Notes:
      - Depth 0 is the starting directory; the maximum depth is reported as-is.
      - The directory total includes the starting directory.
    """

    def __init__(self, report: ActivityReport) -> None:
        self._report = report

    def summary_lines(self) -> List[str]:
        r = self._report
        return [
            f"Total Number of Directories traversed {r.directories} "
            f"(containing {r.linked_directories} links)",
            f"Maximum depth descended: {r.max_depth}",
            f"Total Number of Files: {r.files} (of which {r.linked_files} are linked)",
            f"Total File Size: {human_size(r.total_bytes)}",
        ]

