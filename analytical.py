'''
@date: 3 Oct 2017
@brief: Analytical solutions used to verify the panel method.

References:
[1] Katz, J. & Plotkin, A., 2001. Low-Speed Aerodynamics. Cambridge
	University Press.
[2] Anderson, J.D., 2011. Fundamentals of Aerodynamics. McGraw-Hill.
[3] Helmbold, H.B., 1942. Der unverwundene Ellipsenflugel als tragende
	Wirbelflache. Jahrbuch der Deutschen Luftfahrtforschung.
'''

import numpy as np


def sphere_cp(theta):
	'''
	Pressure coefficient over a sphere in uniform flow, with theta the angle
	from the stagnation point. Ref.[1], sec. 3.11
	'''
	return 1.-9./4.*np.sin(theta)**2


def sphere_surface_velocity(X,R,Uinf,centre=(0.,0.,0.)):
	'''
	Surface velocity at points X (N,3) over a sphere of radius R in a uniform
	flow Uinf (3,).
	'''

	Uinf=np.asarray(Uinf,dtype=float)
	Nv=(np.asarray(X,dtype=float)-np.asarray(centre,dtype=float))/R
	Un=np.dot(Nv,Uinf)

	return 1.5*(Uinf-Un[:,None]*Nv)


def flat_plate_source_strength(normal,Vapp):
	'''
	Source strength over a panel of normal moving with apparent velocity Vapp
	(body velocity minus free stream), from the Neumann boundary condition.
	'''
	return np.dot(normal,Vapp)


def lift_slope_thin_aerofoil():
	''' 2D lift slope of a thin aerofoil. Ref.[2], sec. 4.7 '''
	return 2.*np.pi


def lift_slope_elliptic(AR):
	''' Lift slope of an elliptic wing from lifting line theory. Ref.[2], 5.3 '''
	return 2.*np.pi/(1.+2./AR)


def lift_slope_helmbold(AR):
	'''
	Lift slope of a low aspect ratio straight wing, as per Helmbold's
	equation (Ref.[3]).
	'''
	return 2.*np.pi*AR/(2.+np.sqrt(AR**2+4.))




if __name__=='__main__':

	import matplotlib.pyplot as plt

	ARv=np.linspace(0.5,20.,100)

	fig = plt.figure('Lift slope',(8,6))
	ax=fig.add_subplot(111)
	ax.plot(ARv,lift_slope_elliptic(ARv),'k',label=r'elliptic')
	ax.plot(ARv,lift_slope_helmbold(ARv),'r',label=r'Helmbold')
	ax.plot(ARv,0.*ARv+lift_slope_thin_aerofoil(),'b--',label=r'2D')
	ax.set_xlabel(r'AR')
	ax.set_ylabel(r'$C_{L \alpha}$')
	ax.legend()
	plt.show()
