"""
Quadrilateral Detection Module

Finds perspective-distorted rectangles (documents, signs, whiteboards)
in images, ranks them by confidence and plans the point correspondence
used to rectify the chosen one.
"""

from .background import BackgroundDetector
from .config import DetectionConfig, DEFAULT_CONFIG
from .corners import assign_corners
from .detector import QuadrilateralDetector, detect
from .exceptions import QuadDetectionError, InvalidImageError, ConfigurationError
from .models import Point2D, DetectedQuadrilateral, DetectionResult, CorrectionPlan
from .planner import AspectRatio, plan_correction, scale_to_display
from .primitives import VisionPrimitives, OpenCVPrimitives
from .visualizer import CandidateVisualizer
from .warp import apply_correction

__all__ = [
    'AspectRatio',
    'BackgroundDetector',
    'CandidateVisualizer',
    'ConfigurationError',
    'CorrectionPlan',
    'DEFAULT_CONFIG',
    'DetectedQuadrilateral',
    'DetectionConfig',
    'DetectionResult',
    'InvalidImageError',
    'OpenCVPrimitives',
    'Point2D',
    'QuadDetectionError',
    'QuadrilateralDetector',
    'VisionPrimitives',
    'apply_correction',
    'assign_corners',
    'detect',
    'plan_correction',
    'scale_to_display',
]
