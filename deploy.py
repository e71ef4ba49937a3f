#!/usr/bin/env python3
"""
Deploy the token and business contracts to the configured network.

Usage:
- Put url, pk, gasPrice and users in .config.json (or DEPLOY_* variables in .env)
- Place compiled artifacts under artifacts/
- Run: python deploy.py        (deploy everything)
- Run: python deploy.py abi    (only export ABIs to abis/)
"""

from deployer.orchestrator import main

if __name__ == "__main__":
    main()
