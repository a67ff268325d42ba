#!/usr/bin/env python3

# Add the src directory to the Python path
import pathlib
import sys
import argparse

src_path = pathlib.Path(__file__).parent.parent
sys.path.append(str(src_path))

from server.webservice import WebService
from server.bootstrap import build_desk
from log.logger import log

def main():
  parser = argparse.ArgumentParser(description='Start the check-in web service')
  parser.add_argument('--interface', default='127.0.0.1',
                      help='Interface to listen on (default: 127.0.0.1)')
  parser.add_argument('--port', type=int, default=8080,
                      help='Port to listen on (default: 8080)')
  parser.add_argument('--roster-csv', default=None,
                      help='Serve a local CSV roster instead of the Google sheet (attendance is kept in memory)')

  args = parser.parse_args()

  try:
    desk = build_desk(roster_csv=args.roster_csv)
    service = WebService(desk, listen_interface=args.interface, port=args.port)

    log.info(f"Starting WebService on {args.interface}:{args.port}")
    service.run()
  except Exception as e:
    log.fatal(f"Error starting WebService: {e}", exception=e)
    sys.exit(1)

if __name__ == "__main__":
  main()
