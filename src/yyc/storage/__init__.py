"""Write-behind persistence of profile snapshots."""
