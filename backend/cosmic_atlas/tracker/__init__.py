from cosmic_atlas.tracker.iss import ISSTracker as ISSTracker
