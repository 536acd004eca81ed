"""
Firebase Test Environment Task Collection
"""
from invoke import Collection

__version__ = '0.1.0'

from .tasks import env_file

namespace = Collection()

for task_name, task in Collection.from_module(env_file).tasks.items():
    namespace.add_task(task)
