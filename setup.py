"""
RPO Insights - scenario metrics backend

Packaging script for the rpo_insights service package.
"""

from setuptools import setup, find_packages


setup(
    name='rpo-insights',
    version='1.0.0',
    author='RPO Insights Team',
    description='Routing optimization result analysis and scenario comparison backend',
    long_description='''
    Aggregates vehicle-routing optimization runs from CSV exports and from the
    RPO summary webhook into comparable per-scenario metrics, with simulated
    fallback data when the webhook is unreachable.
    ''',
    packages=find_packages(include=['rpo_insights', 'rpo_insights.*']),
    install_requires=[
        'fastapi>=0.100.0',
        'uvicorn>=0.22.0',
        'pydantic>=2.0',
        'python-dotenv>=1.0.0',
        'httpx>=0.24.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-asyncio>=0.21',
            'pytest-mock>=3.10',
            'pytest-cov>=4.0',
        ],
    },
    zip_safe=False,
    python_requires='>=3.9',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
)
