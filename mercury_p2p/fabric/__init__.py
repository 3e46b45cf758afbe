from .fabric import Fabric as Fabric
