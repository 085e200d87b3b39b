# infrastructure/forms/__init__.py
from infrastructure.forms.file_finder import FormDefinitionFinder
from infrastructure.forms.yaml_loader import FormDefinitionLoadError, YamlFormDefinitionLoader

__all__ = [
    "FormDefinitionFinder",
    "FormDefinitionLoadError",
    "YamlFormDefinitionLoader",
]
