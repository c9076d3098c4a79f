"""PLC 程式檔索引與歸檔整理工具。"""

__version__ = "0.1.0"
