'''
@date: 3 Oct 2017
@brief: collection of methods to define dynamic cases. All methods take in
input a body.Body instance and return a function of time, to be passed as
kinematics to upm3d_dyn.Solver.solve_dyn.
@note: all methods assume the body at t=0 s is already positioned, and its
velocity (e.g. the flight speed) is already set. The motion is superimposed.

References:
[1] Simpson, R.J.S., Palacios, R. & Murua, J., 2013. Induced-Drag
	Calculations in the Unsteady Vortex Lattice Method. AIAA Journal, 51(7),
	pp.1775-1779.
'''

import numpy as np
import matplotlib.pyplot as plt
from scipy.spatial.transform import Rotation


def plunge(B,f0,H):
	'''
	Set body plunge motion of frequency f0 (Hz) and amplitude H such that:
		z(t) = z(t=0) + H*[1-cos(2*pi*f0*t)]
	which is as per Ref.1, except for the constant term.

	@warning: the initial shape of the wake is flat. To improve convergence
	an initial sinusoidal wake should be assumed
	'''

	pos0=B.position.copy()
	vel0=B.velocity.copy()
	w0=2.*np.pi*f0

	def motion(t):
		dz=np.array([0.,0.,H*(1.-np.cos(w0*t))])
		dzdt=np.array([0.,0.,H*w0*np.sin(w0*t)])
		B.set_position(pos0+vel0*t+dz)
		B.set_velocity(vel0+dzdt)

	return motion


def pitch(B,f0,A,axis=(0.,1.,0.)):
	'''
	Set body pitch motion of frequency f0 (Hz) and amplitude A (rad) about
	axis (global frame) through the body position:
		a(t) = A*sin(2*pi*f0*t)
	'''

	pos0=B.position.copy()
	vel0=B.velocity.copy()
	att0=B.attitude
	axis=np.asarray(axis,dtype=float)
	axis=axis/np.linalg.norm(axis)
	w0=2.*np.pi*f0

	def motion(t):
		a=A*np.sin(w0*t)
		dadt=A*w0*np.cos(w0*t)
		B.set_position(pos0+vel0*t)
		B.set_attitude(Rotation.from_rotvec(a*axis)*att0)
		B.set_velocity(vel0)
		B.set_rotational_velocity(dadt*axis)

	return motion


def visualise_motion(S,kinematics,B):
	'''
	Visualise time histories of position and velocity of body B under the
	prescribed kinematics, over the time vector of solver S.
	@note: the body is moved. Kinematics at t=0 are restored at the end.
	'''

	THpos=np.zeros((S.NT,3))
	THvel=np.zeros((S.NT,3))
	for tt in range(S.NT):
		kinematics(S.time[tt])
		THpos[tt,:]=B.position
		THvel[tt,:]=B.velocity
	kinematics(0.0)

	fig = plt.figure('Body %s motion'%B.id,(10,6))

	ax = fig.add_subplot(121)
	ax.set_title(r'Position')
	ax.plot(S.time,THpos[:,0],'b',label=r'x')
	ax.plot(S.time,THpos[:,1],'r',label=r'y')
	ax.plot(S.time,THpos[:,2],'k',label=r'z')
	ax.legend()

	ax = fig.add_subplot(122)
	ax.set_title(r'Velocity')
	ax.plot(S.time,THvel[:,0],'b',label=r'x')
	ax.plot(S.time,THvel[:,1],'r',label=r'y')
	ax.plot(S.time,THvel[:,2],'k',label=r'z')
	ax.legend()

	return fig
