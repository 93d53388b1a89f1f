# ledger.api.v1 package - routers bound from the contract registry
from . import auth, dashboard, health, transactions

routers = [health.router, auth.router, transactions.router, dashboard.router]
