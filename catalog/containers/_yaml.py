from ruamel.yaml import YAML
from ..types import ID


def get_yaml():
    yaml = YAML(typ='safe')
    yaml.width = 120
    yaml.default_flow_style = False
    yaml.register_class(ID)
    return yaml
