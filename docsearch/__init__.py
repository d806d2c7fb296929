"""DocSearch - поиск и управление текстовыми документами"""

__version__ = "1.0.0"
