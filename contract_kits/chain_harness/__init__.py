# Chain Test Harness
# Run a wasmd node in a container, fund test accounts, deploy contract packages

from .client import WasmdClient, ExecResult
from .container import CosmWasmContainer, StartedCosmWasmContainer, HarnessSettings
from .deployer import Deployed, deploy, deploy_cw20
from .contracts import SatLayerContracts

__all__ = [
    'WasmdClient',
    'ExecResult',
    'CosmWasmContainer',
    'StartedCosmWasmContainer',
    'HarnessSettings',
    'Deployed',
    'deploy',
    'deploy_cw20',
    'SatLayerContracts',
]
