"""
Utility modules: 입력 파싱 및 결과 시각화
"""

from .input_parser import InputParser, SAMPLE_PROCESSES
from .visualization import Visualizer

__all__ = ['InputParser', 'SAMPLE_PROCESSES', 'Visualizer']
