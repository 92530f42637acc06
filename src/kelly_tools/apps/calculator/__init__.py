"""Kelly bet calculator.

Command-line front end over the sizing engine: odds conversion, naive and
liquidity-aware Kelly stakes, and payout distributions. No bets are placed.
"""
