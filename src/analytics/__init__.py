"""
Rating analytics for the fluency dashboard.

Pure aggregation steps applied to a snapshot of rating records:
- Time-window filter
- Trend series and rolling average
- Score distributions
- Activity heatmap
- Best / worst / recent highlights and summary statistics
- Aggregator bundling all of the above
"""
