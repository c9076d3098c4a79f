from setuptools import find_packages, setup

setup(
    name="plc-archive-tidy",
    version="0.1.0",
    description="PLC 程式檔索引、重複檔歸檔與 bak 檔清理工具",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=["Send2Trash>=1.8"],
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["plc-archive-tidy=plc_archive_tidy.main:main"]},
)
