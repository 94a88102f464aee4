"""Run the ingress-store command line tool."""

from ingress_store.tool.ingress_store import main

if __name__ == "__main__":
    main()
