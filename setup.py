from setuptools import setup, find_packages

setup(
    name='ftv_alarm_toolkit',
    version='0.1.0',
    description='Rebuild PLC alarm tags from FactoryTalk View alarm XML exports and export them to Excel',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=[
        'lxml>=4.9.0',
        'openpyxl>=3.1.0',
    ],
    extras_require={
        'dev': ['pytest>=7.0'],
        'mcp': ['mcp[cli]>=1.2.0,<2'],
    },
    entry_points={
        'console_scripts': [
            'ftv-alarm-export=ftv_alarm_toolkit.cli:main',
            'ftv-alarm-mcp-server=ftv_alarm_toolkit.mcp_server:main',
        ],
    },
)
