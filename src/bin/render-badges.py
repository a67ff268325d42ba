#!/usr/bin/env python3
"""
Renders badges for the whole roster (or the given ids).
Usage: python render-badges.py [--pdf out.pdf] [--outdir DIR] [--base-url URL] [ids...]
"""

import pathlib
import sys
import argparse

src_path = pathlib.Path(__file__).parent.parent
sys.path.append(str(src_path))

from artifacts.badges.pdf import PdfRenderer
from server.bootstrap import build_desk
from model.errors import CheckinError
from log.logger import log

def selected_participants(desk, ids):
  if not ids:
    return [p for p in desk.roster.list_all() if p.identifier]
  return [desk.roster.find_by_identifier(identifier) for identifier in ids]

def main():
  parser = argparse.ArgumentParser(description='Render participant badges')
  parser.add_argument('ids', nargs='*', help='Participant ids (default: everyone on the roster)')
  parser.add_argument('--outdir', default='artifacts/badges', help='Directory for PNG badges')
  parser.add_argument('--pdf', default=None, help='Write every badge into this PDF instead of PNG files')
  parser.add_argument('--base-url', default=None, help='Origin for the attendance links (default: base_url from secrets)')
  parser.add_argument('--roster-csv', default=None, help='Read the roster from a CSV file')
  args = parser.parse_args()

  try:
    desk = build_desk(roster_csv=args.roster_csv)
    participants = selected_participants(desk, args.ids)
  except CheckinError as exc:
    log.fatal(f"Unable to load roster: {exc.message}", exception=exc)
    sys.exit(1)

  if not (args.base_url or desk.config.base_url):
    log.fatal("No base URL for the attendance links; set base_url in secrets or pass --base-url")
    sys.exit(1)

  badges = [desk.badge_for(participant, base_url=args.base_url) for participant in participants]

  if args.pdf:
    count, failed = PdfRenderer(desk.get_renderer().fonts).render_badges(args.pdf, badges)
    if count:
      print(f"Wrote {count} badges to {args.pdf}")
    if failed:
      sys.exit(1)
    return

  failures = 0
  for badge in badges:
    try:
      badge.generate(args.outdir)
      print(f"Generated badge: {badge.path(args.outdir)}")
    except CheckinError as exc:
      failures += 1
      log.error(f"Unable to render badge for {badge.participant.identifier}: {exc.message}", exception=exc)

  if failures:
    sys.exit(1)

if __name__ == "__main__":
  main()
