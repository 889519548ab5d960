from .frame_stack import FrameStack
from .renderer import TreeRenderer
from .report_service import ReportService, human_size
from .scanner import DirectoryScanner, classify_entry
from .traversal import TraversalEngine
from .visited import VisitedSet


__all__ = [
    'DirectoryScanner',
    'FrameStack',
    'ReportService',
    'TraversalEngine',
    'TreeRenderer',
    'VisitedSet',
    'classify_entry',
    'human_size',
]
