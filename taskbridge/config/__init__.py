from .security import SecurityConfig
from .workflow import WorkflowConfig
