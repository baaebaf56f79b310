"""
ia32_disasm: 32ビット x86 機械語の逆アセンブラ。
"""
__version__ = "0.1.0"
